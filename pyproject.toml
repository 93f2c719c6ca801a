[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "sysprobe"
version = "0.1.0"
description = "Read host and process information from Linux procfs, and parse macOS sysctl data and AIX utmp records"
requires-python = ">=3.10"
dependencies = []
keywords = ["sysinfo", "procfs", "host", "process", "monitoring", "linux", "darwin", "aix"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: AIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["sysprobe*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
