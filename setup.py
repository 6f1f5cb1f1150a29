from setuptools import setup, find_packages

setup(
    name="ketch",
    description="A Build system for the C language",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords=["c", "build"],
    python_requires=">=3.11",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "returns>=0.19",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "ketch = ketch.main:main",
        ]
    },
    setup_requires=[
        "setuptools>=42",
        "setuptools_scm>=3.5",
    ],
    use_scm_version={
        "write_to": "ketch/__version__.py",
        "fallback_version": "0.1.0",
    },
)
