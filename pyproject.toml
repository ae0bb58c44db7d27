[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tamalyon"
version = "0.1.0"
description = "A virtual pet lion whose needs decay over time, shared between players over WebSockets"
requires-python = ">=3.10"
keywords = ["tamagotchi", "virtual pet", "game", "websocket", "multiplayer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "websockets>=12",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "pytest-asyncio>=0.21",
]

[project.scripts]
tamalyon = "tamalyon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tamalyon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
