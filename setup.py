# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="memfs",
    version="0.1.0",
    description="In-memory hierarchical filesystem simulator with name index and largest-file tracking",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["memfs", "memfs.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'memfs=memfs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
