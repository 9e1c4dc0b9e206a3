[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asteroidfield"
version = "0.1.0"
description = "A two-player arcade asteroid shooter with a small entity-component game core"
requires-python = ">=3.10"
keywords = ["game", "arcade", "asteroids", "shooter", "pygame", "ecs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
asteroidfield = "asteroidfield.app:main"

[tool.hatch.build.targets.wheel]
packages = ["asteroidfield"]

[tool.pytest.ini_options]
addopts = "-ra"
