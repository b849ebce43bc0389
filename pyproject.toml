[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sockdrills"
version = "0.1.0"
description = "Small socket tools: echo clients and servers, pipes, console waiting, broadcast and multicast"
requires-python = ">=3.10"
dependencies = []
keywords = ["socket", "echo", "select", "poll", "epoll", "broadcast", "multicast", "udp", "tcp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sockdrills-echo-client = "sockdrills.echo_client:main"
sockdrills-echo-server = "sockdrills.echo_server:main"
sockdrills-logging-server = "sockdrills.logging_server:main"
sockdrills-pipes = "sockdrills.pipes:main"
sockdrills-console = "sockdrills.console:main"
sockdrills-broadcast-send = "sockdrills.broadcast:main_send"
sockdrills-broadcast-recv = "sockdrills.broadcast:main_receive"
sockdrills-multicast-send = "sockdrills.multicast:main_send"
sockdrills-multicast-recv = "sockdrills.multicast:main_receive"

[tool.hatch.build.targets.wheel]
packages = ["sockdrills"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
