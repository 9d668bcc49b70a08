from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="roi_annotation",
    version=Path("./roi_annotation/VERSION").read_text().strip(),
    packages=find_packages(include=["roi_annotation", "roi_annotation.*"]),
    package_data={"roi_annotation": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python",
        "easydict",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["roi_annotation=roi_annotation.cli:main"],
    },
)
