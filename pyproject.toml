[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "soarpkg"
version = "0.1.0"
description = "Building blocks of a package manager for portable Linux binaries, AppImages and FlatImages"
requires-python = ">=3.11"
keywords = [
    "package-manager",
    "appimage",
    "flatimage",
    "static-binaries",
    "portable",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
    "Topic :: System :: Installation/Setup",
]
dependencies = [
    "tomli-w>=1.0",
    "pillow>=10.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
soar = "soarpkg.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["soarpkg"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
