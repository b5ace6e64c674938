from setuptools import setup, find_packages

setup(
    name="actiongraph",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["actiongraph", "actiongraph.*"]),
    install_requires=[
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio>=0.21",
        ],
    },
    python_requires=">=3.9",
    description="lightweight labeled-transition orchestration for async units of work",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
