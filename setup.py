from setuptools import setup

version = open("./VERSION").read().strip()


README = open("./README.md").read()


setup(
    name="trx-chem",
    version=version,
    description="Reactive chemical transport kernel for overland and channel watershed simulation",
    long_description=README,
    long_description_content_type="text/markdown",
    classifiers=[
        # Get strings from
        # http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "Environment :: Console",
        "License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="hydrology watershed chemical transport partitioning sediment",
    author="RESPEC, Inc",
    author_email="",
    packages=["TRX", "TRXtools", "TRXIO"],
    include_package_data=True,
    zip_safe=False,
    install_requires=["numpy", "pandas", "numba", "tables", "cltoolbox"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["trx=TRXtools.TRX_CLI:main"]},
    test_suite="tests",
    python_requires=">=3.9",
)
