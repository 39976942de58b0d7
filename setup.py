from setuptools import setup, find_packages

setup(
    name="folio",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0.1",
        "click>=8.1.0",
        "rich>=13.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "folio=folio.cli.main:main",
        ],
    },
    python_requires=">=3.10",
)
