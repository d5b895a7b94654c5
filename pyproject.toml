[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "calcrypt"
version = "0.1.0"
description = "Streaming hashes, HMAC-SHA256 and AES-256 ciphers (CBC, GCM, CTR, key wrap) behind a small, uniform interface"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["cryptography", "aes", "gcm", "ctr", "cbc", "keywrap", "hmac", "sha256", "sha1", "md5", "hash"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["calcrypt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
