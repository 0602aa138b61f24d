from setuptools import setup, find_packages

setup(
    name="density-finder",
    version="0.1.0",
    description="ASTM D 1250 / IP 200 Table 53: observed density reduced to density at 15°C",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0",
        "matplotlib>=3.7",
        "plotly>=5.15",
    ],
    extras_require={
        "dev": ["pytest>=7.0", "scipy>=1.11", "black", "flake8"],
    },
    entry_points={
        "console_scripts": [
            "density-finder=main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Topic :: Scientific/Engineering",
    ],
)
