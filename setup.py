from setuptools import find_packages, setup

setup(
    name="pulsebar",
    version="0.1.0",
    description="Concurrent in-place progress bars for the terminal",
    python_requires=">=3.10",
    packages=find_packages(include=["pulsebar", "pulsebar.*"]),
    install_requires=[
        "colorama>=0.4.6",
        "tracerite>=1.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pulsebar-demo=pulsebar.cli:main",
        ],
    },
)
