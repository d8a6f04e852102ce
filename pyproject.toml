[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netwatch"
version = "0.1.0"
description = "Network interface traffic monitor with a receive-rate analyzer and alert logger"
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "monitoring", "proc", "net-dev", "alerts", "ipc"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netwatch-monitor = "netwatch.monitor:main"
netwatch-analyzer = "netwatch.analyzer:main"
netwatch-logger = "netwatch.logger:main"

[tool.hatch.build.targets.wheel]
packages = ["netwatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
