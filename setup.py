from setuptools import setup, find_namespace_packages

setup(
    name="genre_atlas",
    version="0.1.0",
    packages=find_namespace_packages(include=['cli*', 'atlas*', 'api*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "fastapi",
        "pydantic>=2",
        "anyascii",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "genre-atlas=cli.main:main",
        ],
    },
)
