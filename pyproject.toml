[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "naza"
version = "0.1.0"
description = "Small building blocks: byte order helpers, bit streams, queues, caches, hash rings, rate meters, padding and AES-CBC, console bar charts, sockets, file batch tools and a few command-line helpers."
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "bitreader",
    "endian",
    "exp-golomb",
    "lru",
    "circular-queue",
    "consistent-hash",
    "bitrate",
    "pkcs7",
    "aes-cbc",
    "bar-chart",
    "toolbox",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
naza-add-go-license = "naza.tools.add_go_license:main"
naza-add-blog-license = "naza.tools.add_blog_license:main"
naza-chartbar = "naza.tools.chartbar_csv:main"
naza-myapp = "naza.tools.myapp:main"
naza-camel = "naza.tools.camel:main"
naza-diffpstack = "naza.tools.diffpstack:main"

[tool.hatch.build.targets.wheel]
packages = ["naza"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
