[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jobcommon"
version = "0.1.0"
description = "Shared job models, status conditions and helpers for distributed training job controllers"
requires-python = ">=3.10"
dependencies = []
keywords = ["jobs", "training", "controller", "conditions", "replicas", "pods"]
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
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jobcommon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
