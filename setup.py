import os
import re
from codecs import open

from setuptools import find_packages
from setuptools import setup

# Based on https://github.com/pypa/sampleproject/blob/main/setup.py
# and https://python-packaging-user-guide.readthedocs.org/

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()
long_description_content_type = "text/markdown"

with open(os.path.join(here, "httpbytes/version.py")) as f:
    match = re.search(r'VERSION = "(.+?)"', f.read())
    assert match
    VERSION = match.group(1)

setup(
    name="httpbytes",
    version=VERSION,
    description="Convert raw HTTP/1.1 request and response bytes to structured messages and back.",
    long_description=long_description,
    long_description_content_type=long_description_content_type,
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Testing",
    ],
    packages=find_packages(
        include=[
            "httpbytes",
            "httpbytes.*",
        ]
    ),
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "httpbytes = httpbytes.tools.main:httpbytes",
        ],
    },
    python_requires=">=3.10",
    # https://packaging.python.org/en/latest/discussions/install-requires-vs-requirements/#install-requires
    # It is not considered best practice to use install_requires to pin dependencies to specific versions.
    install_requires=[
        "Brotli>=1.1",
        "zstandard>=0.11",
    ],
    extras_require={
        "dev": [
            "hypothesis>=5.8",
            "pytest-asyncio>=0.21",
            "pytest-cov>=2.7.1",
            "pytest>=7.0",
        ],
    },
)
