[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "signalws"
version = "0.1.0"
description = "A small WebSocket signalling server for WebRTC peers, with lobbies, sealing and message relay."
requires-python = ">=3.10"
keywords = ["webrtc", "signalling", "websocket", "lobby", "aiohttp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Communications",
]
dependencies = [
    "aiohttp>=3.9",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
    "aiohttp>=3.9",
]

[project.scripts]
signalws = "signalws.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["signalws"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
