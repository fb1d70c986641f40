from setuptools import setup, find_packages

setup(
    name="ApiBlame",
    version="0.1.0",
    packages=find_packages(include=["ApiBlame", "ApiBlame.*"]),
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=[
        "esprima==4.0.1",
        "pandas==2.2.3",
        "tqdm==4.66.4",
        "python-dotenv==1.0.1",
        "pydantic==2.10.6",
        "pygit2",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            # Define command-line scripts here
        ],
    },
)
