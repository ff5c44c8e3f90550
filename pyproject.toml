[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gardenray"
version = "1.0.0"
description = "Software-rendered 3D mazes: wireframe, bitmapped and raycast views into a 320x200 palette frame buffer"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "raycasting",
    "maze",
    "framebuffer",
    "pcx",
    "targa",
    "bmp",
    "texture-mapping",
    "lightsourcing",
    "fixed-point",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gardenray-maketrig = "gardenray.trig:main"
gardenray-mklite = "gardenray.lighting:main"

[tool.hatch.build.targets.wheel]
packages = ["gardenray"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
