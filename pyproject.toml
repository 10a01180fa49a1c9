[build-system]
requires = ["setuptools>=68", "wheel"]
build-backend = "setuptools.build_meta"

[project]
name = "qbfrt"
version = "0.3.2"
description = "Command line tool for working with qBittorrent's fastresume data"
requires-python = ">=3.10"
keywords = ["qbittorrent", "fastresume", "torrent", "sqlite", "bencode"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: File Sharing",
    "Topic :: Utilities",
]
dependencies = [
    "platformdirs>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
qbfrt = "qbfrt.cli:main"

[tool.setuptools.packages.find]
include = ["qbfrt*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
