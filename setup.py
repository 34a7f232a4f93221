from setuptools import setup, find_packages
import os

# Read version from __init__.py
def get_version():
    """Get version from nodepanel/__init__.py"""
    init_file = os.path.join(os.path.dirname(__file__), "nodepanel", "__init__.py")
    with open(init_file, "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"\'')
    raise RuntimeError("Unable to find version string.")

# Installation Examples:
# - Base package only: pip install nodepanel
# - With test tooling: pip install "nodepanel[dev]"

extras_require = {
    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "coverage>=7.3.2",
    ],
}

setup(
    name="nodepanel",
    version=get_version(),
    description="Type-directed property panels for node-graph editors",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: User Interfaces",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    keywords="node-graph, property-panel, widgets, editor",
    packages=find_packages(include=["nodepanel", "nodepanel.*"]),
    install_requires=[
        # Footprint affine math
        "numpy>=1.26.4",

        # Configuration and slot metadata files
        "PyYAML>=6.0.2",
    ],
    extras_require=extras_require,
)
