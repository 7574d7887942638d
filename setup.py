from setuptools import setup, find_packages

setup(
    name="lww-graph",
    version="0.1.0",
    description="State-based last-write-wins directed graph CRDT",
    author="adamfilli",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    install_requires=[
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.13",
)
