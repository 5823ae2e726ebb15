[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilekit"
version = "0.1.0"
description = "Tiling window manager model, gap-aware layouts, a dynamic menu engine, status-bar markup and a file-testing filter"
requires-python = ">=3.10"
dependencies = []
keywords = ["window-manager", "tiling", "layouts", "menu", "launcher", "stest", "status-bar"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stest = "tilekit.stest:main"

[tool.hatch.build.targets.wheel]
packages = ["tilekit"]

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
warn_unused_ignores = true
warn_redundant_casts = true
