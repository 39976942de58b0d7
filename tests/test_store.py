"""Tests for the document store."""

from datetime import date
from pathlib import Path

import pytest

from folio.document import Document
from folio.errors import FolioError, ParseError, ValidationError
from folio.frontmatter import load, serialize
from folio.store import DocumentStore, slug_for


@pytest.mark.parametrize(
    "relative,slug",
    [
        ("hello-world/index.md", "hello-world"),
        ("hello-world.md", "hello-world"),
        ("2024/docker/index.markdown", "2024/docker"),
        ("notes/draft.md", "notes/draft"),
        ("index.md", "index"),
    ],
)
def test_slug_for(tmp_path: Path, relative: str, slug: str) -> None:
    """Test slug derivation from storage paths."""
    assert slug_for(tmp_path / relative, tmp_path) == slug


def test_slug_for_outside_root(tmp_path: Path) -> None:
    """Test that files outside the root have no slug."""
    with pytest.raises(ValueError):
        slug_for(tmp_path / "elsewhere.md", tmp_path / "content")


def test_load_isolates_failures(content_dir: Path) -> None:
    """Test that one broken post does not stop the others."""
    store = DocumentStore(content_dir)
    report = store.load()

    assert not report.ok
    assert sorted(doc.slug for doc in report.documents) == ["hello-world", "spring-rabbitmq"]
    broken = content_dir / "bluetooth-x11" / "index.md"
    assert list(report.failures) == [broken]
    error = report.failures[broken]
    assert isinstance(error, ParseError)
    assert "spoiler" in error.message
    assert error.path == str(broken)

    assert len(store) == 2
    assert "bluetooth-x11" not in store
    assert store.slugs() == ["hello-world", "spring-rabbitmq"]


def test_get(content_dir: Path) -> None:
    """Test lookup by slug, loading lazily."""
    store = DocumentStore(content_dir)
    document = store.get("hello-world")
    assert document.title == "Hello, World"
    assert document.source_path == content_dir / "hello-world" / "index.md"
    with pytest.raises(KeyError, match="missing"):
        store.get("missing")


def test_iteration_is_newest_first(content_dir: Path) -> None:
    """Test ordering by date then slug."""
    store = DocumentStore(content_dir)
    store.create(Document.create("a-same-day", title="A", date="2024-01-01", spoiler="S"))
    assert [doc.slug for doc in store] == ["a-same-day", "hello-world", "spring-rabbitmq"]


def test_duplicate_slug(tmp_path: Path) -> None:
    """Test that a second file with the same slug is reported."""
    text = "---\ntitle: T\ndate: 2024-01-01\nspoiler: S\n---\n"
    (tmp_path / "post").mkdir()
    (tmp_path / "post" / "index.md").write_text(text, encoding="utf-8")
    (tmp_path / "post.md").write_text(text, encoding="utf-8")

    report = DocumentStore(tmp_path).load()
    assert len(report.documents) == 1
    assert len(report.failures) == 1
    assert "Duplicate slug" in next(iter(report.failures.values())).message


def test_missing_root(tmp_path: Path) -> None:
    """Test that a missing directory loads as empty."""
    store = DocumentStore(tmp_path / "nope")
    report = store.load()
    assert report.ok
    assert len(store) == 0


def test_root_is_a_file(tmp_path: Path) -> None:
    """Test that a file root is an error."""
    path = tmp_path / "file.md"
    path.write_text("", encoding="utf-8")
    with pytest.raises(FolioError, match="not a directory"):
        DocumentStore(path).load()


def test_create(content_dir: Path) -> None:
    """Test authoring a new post."""
    store = DocumentStore(content_dir)
    document = Document.create(
        "bigquery-testing",
        title="Integration testing BigQuery",
        date=date(2024, 2, 2),
        spoiler="With an emulator container.",
        body="\nBody\n",
    )
    path = store.create(document)

    assert path == content_dir / "bigquery-testing" / "index.md"
    assert path.read_text(encoding="utf-8") == serialize(document)
    stored = store.get("bigquery-testing")
    assert stored.source_path == path
    assert stored.header is not None
    assert load(path).front_matter == document.front_matter

    with pytest.raises(FileExistsError):
        store.create(document)
    with pytest.raises(FileExistsError):
        store.create(document.with_body("other").model_copy(update={"slug": "spring-rabbitmq"}))


def test_create_refuses_existing_file(tmp_path: Path) -> None:
    """Test that an unparseable file still blocks its slug."""
    (tmp_path / "broken").mkdir()
    (tmp_path / "broken" / "index.md").write_text("oops\n", encoding="utf-8")
    store = DocumentStore(tmp_path)
    document = Document.create("broken", title="T", date="2024-01-01", spoiler="S")
    with pytest.raises(FileExistsError):
        store.create(document)


def test_save_edits_in_place(content_dir: Path) -> None:
    """Test that edits are written back to the original file."""
    store = DocumentStore(content_dir)
    original_path = content_dir / "spring-rabbitmq.md"
    original = original_path.read_text(encoding="utf-8")

    document = store.get("spring-rabbitmq")
    path = store.save(document.with_body(document.body + "\nMore.\n"))
    assert path == original_path
    assert path.read_text(encoding="utf-8") == original + "\nMore.\n"

    edited = store.get("spring-rabbitmq").with_front_matter(spoiler="New spoiler")
    store.save(edited)
    reloaded = load(original_path)
    assert reloaded.spoiler == "New spoiler"
    assert reloaded.front_matter.extra == {"tags": ["spring", "rabbitmq"]}


def test_save_unknown_slug(content_dir: Path) -> None:
    """Test that save only edits existing posts."""
    store = DocumentStore(content_dir)
    document = Document.create("unknown", title="T", date="2024-01-01", spoiler="S")
    with pytest.raises(KeyError):
        store.save(document)
    assert not (content_dir / "unknown").exists()


def test_load_isolates_impossible_dates(tmp_path: Path) -> None:
    """Test that a date YAML cannot construct does not stop the others."""
    (tmp_path / "a.md").write_text(
        "---\ntitle: A\ndate: 2024-02-30\nspoiler: S\n---\n", encoding="utf-8"
    )
    (tmp_path / "b.md").write_text(
        "---\ntitle: B\ndate: 2024-02-28\nspoiler: S\n---\n", encoding="utf-8"
    )

    report = DocumentStore(tmp_path).load()
    assert [doc.slug for doc in report.documents] == ["b"]
    assert list(report.failures) == [tmp_path / "a.md"]
    assert "Invalid date" in report.failures[tmp_path / "a.md"].message


def test_load_isolates_unreadable_files(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a file that cannot be read is recorded as a failure."""
    text = "---\ntitle: T\ndate: 2024-01-01\nspoiler: S\n---\n"
    (tmp_path / "locked.md").write_text(text, encoding="utf-8")
    (tmp_path / "open.md").write_text(text, encoding="utf-8")

    real_open = open

    def guarded_open(file, *args, **kwargs):
        if Path(file).name == "locked.md":
            raise PermissionError(13, "Permission denied", str(file))
        return real_open(file, *args, **kwargs)

    monkeypatch.setattr("folio.frontmatter.open", guarded_open, raising=False)

    report = DocumentStore(tmp_path).load()
    assert [doc.slug for doc in report.documents] == ["open"]
    error = report.failures[tmp_path / "locked.md"]
    assert "Permission denied" in error.message
    assert error.path == str(tmp_path / "locked.md")


@pytest.mark.parametrize("slug", ["../outside", "/tmp/outside", "a/../../outside", "a/./b", ""])
def test_create_rejects_slugs_outside_root(tmp_path: Path, slug: str) -> None:
    """Test that a post can only be authored below the content root."""
    root = tmp_path / "content"
    store = DocumentStore(root)
    document = Document.create(slug, title="T", date="2024-01-01", spoiler="S")

    with pytest.raises(ValidationError, match="Invalid slug"):
        store.create(document)
    assert not (tmp_path / "outside").exists()
    assert len(store) == 0
