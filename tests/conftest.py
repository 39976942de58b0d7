"""Test fixtures for folio."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

HELLO_WORLD = """---
title: 'Hello, World'
date: '2024-01-01'
spoiler: "First post on the new blog."
---

# Hello

Some text with a [link](https://example.com) and an image:

![diagram](https://images.example.com/diagram.png)

```yaml
version: '3'
---
services:
  dynamodb:
    image: amazon/dynamodb-local
```
"""

RABBITMQ = """---
title: Spring Boot and RabbitMQ
date: 2023-05-20
spoiler: Declaring exchanges and queues with Declarables.
tags:
  - spring
  - rabbitmq
---

## Declarables

```java
@Bean
public Declarables topicBindings() {
    return new Declarables();
}
```
"""

MISSING_SPOILER = """---
title: 'Bluetooth headphones on X11'
date: '2022-11-02'
---

#!/bin/bash
"""


@pytest.fixture(autouse=True)
def reset_folio_logger() -> Generator[None, None, None]:
    """Remove handlers installed by configure_logging after each test."""
    yield
    folio_logger = logging.getLogger("folio")
    for handler in folio_logger.handlers[:]:
        folio_logger.removeHandler(handler)
        handler.close()
    folio_logger.setLevel(logging.NOTSET)
    folio_logger.propagate = True


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config lookups and log files inside the test directory."""
    monkeypatch.chdir(tmp_path)
    for var in ("FOLIO_CONFIG", "FOLIO_PATHS_CONTENT_DIR", "FOLIO_PATHS_LOGS_DIR", "FOLIO_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create a content directory with two valid posts and one broken one.

    Args:
        tmp_path: Pytest temporary path fixture

    Returns:
        Path to the content directory
    """
    root = tmp_path / "content" / "blog"
    (root / "hello-world").mkdir(parents=True)
    (root / "hello-world" / "index.md").write_text(HELLO_WORLD, encoding="utf-8")
    (root / "spring-rabbitmq.md").write_text(RABBITMQ, encoding="utf-8")
    (root / "bluetooth-x11").mkdir()
    (root / "bluetooth-x11" / "index.md").write_text(MISSING_SPOILER, encoding="utf-8")
    # Not a post
    (root / "hello-world" / "diagram.png").write_bytes(b"\x89PNG")
    return root
