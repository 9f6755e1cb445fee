[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orbitview"
version = "0.1.0"
description = "Orbital-camera viewer for textured triangle models stored in a plain-text model format"
requires-python = ">=3.10"
dependencies = [
    "pyglet",
]
keywords = ["3d", "model", "viewer", "opengl", "bmp", "orbit camera"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Environment :: MacOS X",
    "Intended Audience :: Education",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
orbitview = "orbitview.viewer:main"

[tool.hatch.build.targets.wheel]
packages = ["orbitview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
