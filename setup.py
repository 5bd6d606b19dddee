from setuptools import setup, find_packages
from os import path
from io import open

setup_dir = path.abspath(path.dirname(__file__))
with open(path.join(setup_dir, 'README.md'),
          encoding='utf-8') as readme_file:
    long_description = readme_file.read()

setup(
    name="hypertile",
    version="0.1",
    packages=find_packages(exclude=["testing", "testing.*"]),
    package_data={"hypertile": ["builtin/*.tiling"]},
    include_package_data=True,

    install_requires=[
        "numpy>=1.22",
        "matplotlib>=3.5"
    ],

    extras_require={
        "test": ["pytest"]
    },

    license="MIT",
    description="""Generate tilings of the hyperbolic plane from a
    combinatorial description, and pan around them""",

    long_description=long_description,
    long_description_content_type="text/markdown"
)
