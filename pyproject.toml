[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "englishapp"
version = "0.1.0"
description = "Learning-progress tracking, levelling helpers and account records for an English learning service"
requires-python = ">=3.10"
dependencies = []
keywords = ["education", "learning", "progress", "gamification", "e-learning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education :: Computer Aided Instruction (CAI)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["englishapp*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
