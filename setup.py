# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treefs",
    version="1.0.0",
    description="In-memory hierarchical filesystem shell with flat-text snapshots",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treefs", "treefs.*"]),
    package_data={"treefs.interface": ["locales/*.json"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'treefs=treefs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
