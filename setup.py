"""setuptools packaging for pomod.

Install the daemon and its ``pomod`` console script:
    pip install .

Point the status bar at it, e.g. for polybar:
    [module/pomod]
    type = custom/script
    exec = pomod
    tail = true
    click-left = kill -USR1 %pid%
    click-right = kill -USR2 %pid%
"""

from setuptools import setup, find_packages

setup(
    name="pomod",
    version="0.1.0",
    description="A dead-simple Pomodoro timer daemon for status bars",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "numpy",
        "platformdirs",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["pomod = pomod.__main__:main"],
    },
)
