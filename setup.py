import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).parent
version_file = HERE / "version.txt"

with open(version_file, "r", encoding="utf-8") as fh:
    version = fh.readlines()[-1].strip()

with open(HERE / "README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open(HERE / "requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [
        line.strip()
        for line in fh
        if line.strip() and not line.startswith("#") and not line.startswith("-e")
    ]

setup(
    name="roadlink_checker",
    version=version,
    description="Flag highway links that are too long or classified inconsistently with the roads they connect",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["roadlink_checker", "roadlink_checker.*"]),
    install_requires=requirements,
    extras_require={"test": ["pytest>=7.0", "hypothesis>=6.0"]},
    entry_points={"console_scripts": ["roadlink-check=roadlink_checker.cli:main"]},
    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    include_package_data=True,
    zip_safe=False,
)
