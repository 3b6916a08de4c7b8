# Copyright 2021 Nokia

from setuptools import setup

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name='yangstruct',
    version='0.1.0',
    packages=['yangstruct'],
    license='Copyright 2021-2024 Nokia.',
    author='Nokia',
    author_email='',
    description='YANG schema to native struct generator and struct runtime library',
    classifiers=[
        "License :: Other/Proprietary License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Code Generators",
        "Development Status :: 3 - Alpha",
    ],
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.10",
    long_description=long_description,
    long_description_content_type="text/markdown",
)
