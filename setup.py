# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="hierarchygrid",
    version="1.0.0",
    description="Render a parent/child record hierarchy as an expandable tree grid",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["hierarchygrid*"]),
    package_data={"hierarchygrid.interface.locales": ["*.json"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "requests",
        "customtkinter",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "hierarchygrid=hierarchygrid.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
