from setuptools import setup, find_packages

setup(
    name="ColorBSP",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[],
    python_requires=">=3.8",
    include_package_data=True,
)
