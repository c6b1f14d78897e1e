from setuptools import setup, find_packages

setup(
    name="tweetsieve",
    version="0.1",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pandas",
        "rapidfuzz",
        "tqdm",
        "orjson",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "tweetsieve=tweetsieve.__main__:main",
        ],
    },
    python_requires=">=3.8",
)
