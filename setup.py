from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = f.read().splitlines()

setup(
    name="arplogger",
    version="1.0.0",
    author="arplogger Contributors",
    description="Passive ARP logger that reports new and changed IP <-> MAC bindings.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests"]),
    install_requires=requirements,
    extras_require={
        "dev": ["pytest>=7.0,<9"],
    },
    entry_points={
        "console_scripts": [
            "arplogger=arplogger.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS :: MacOS X",
        "Topic :: System :: Networking :: Monitoring",
    ],
    python_requires=">=3.11",
)
