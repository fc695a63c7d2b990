from setuptools import setup, find_packages

setup(
    name="dlx-sudoku",
    version="1.0.0",
    description="Dancing Links Sudoku: exact cover search and human-style solving techniques",
    author="robomotic",
    packages=find_packages(include=["dlxsudoku", "dlxsudoku.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "dlx-sudoku=dlxsudoku.cli:main",
        ],
    },
)
