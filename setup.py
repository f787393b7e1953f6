"""
leafletndx
Leaflet-resolved index groups for planar lipid membranes
"""
import sys
from setuptools import setup, find_packages

RELEASE = "0.1.0"

short_description = __doc__.split("\n")

# from https://github.com/pytest-dev/pytest-runner#conditional-requirement
needs_pytest = {'pytest', 'test', 'ptr'}.intersection(sys.argv)
pytest_runner = ['pytest-runner'] if needs_pytest else []


if __name__ == "__main__":

    try:
        with open("README.md", "r") as handle:
            long_description = handle.read()
    except OSError:
        long_description = "\n".join(short_description[2:])

    install_requires = [
        'numpy>=1.16.0',
        'mdanalysis>=2.0.0',
    ]

    setup(
        # Self-descriptive entries which should always be present
        name='leafletndx',
        version=RELEASE,
        description=short_description[1],
        long_description=long_description,
        long_description_content_type="text/markdown",

        packages=find_packages(include=["leafletndx", "leafletndx.*"]),

        entry_points={
            "console_scripts": [
                "leaflets2ndx=leafletndx.cli:main",
            ],
        },

        # Allows `setup.py test` to work correctly with pytest
        setup_requires=[] + pytest_runner,

        install_requires=install_requires,  # Required packages, pulls from pip if needed; do not use for Conda deployment
        extras_require={
            "test": [
                'pytest',
                'mdanalysistests>=2.0.0',
            ],
        },
        platforms=['Linux',
                   'Mac OS-X',
                   'Unix',
                   'Windows'],            # Valid platforms your code works on, adjust to your flavor
        python_requires=">=3.10",          # Python version restrictions

    )
