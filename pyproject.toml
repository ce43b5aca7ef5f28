[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelcore"
version = "0.1.0"
description = "Voxel world core: chunk generation, face culling, meshing, camera control, input state and a task pool"
requires-python = ">=3.10"
keywords = ["voxel", "chunk", "meshing", "world-generation", "perlin", "camera", "threadpool"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
voxelcore-console = "voxelcore.console:main"

[tool.hatch.build.targets.wheel]
packages = ["voxelcore"]

[tool.hatch.build.targets.sdist]
include = ["voxelcore", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
