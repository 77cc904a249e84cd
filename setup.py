from setuptools import setup, find_packages

setup(
    name="opengov-engine",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
    author="OpenGov Engine Team",
    description="Threshold curves, period progress and conviction vote locks for OpenGov referenda",
)
