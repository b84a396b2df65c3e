from setuptools import setup, find_packages

setup (
    name = "tonalis",
    version = "0.1.0",
    description = "Spelled pitches, intervals, scales and accidental placement for tonal music.",
    long_description = open ( 'README.md' ).read ( ),
    long_description_content_type = "text/markdown",
    package_dir = { "": "src" },
    packages = find_packages ( "src" ),
    install_requires = [
        "numpy",
        "pyrsistent",
        "bidict",
        "sortedcontainers",
    ],
    extras_require = {
        "test": [ "pytest" ],
    },
    classifiers = [
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires = ">=3.12",
)
