"""
A setuptools based setup module.

See:
https://packaging.python.org/guides/distributing-packages-using-setuptools/
"""

import setuptools

PACKAGE_DATA = {
    "resxsec": ["data/*.yml", "schemas/*.json"],
}

INSTALL_REQUIRES = [
    "PyYAML",
    "attrs >=22.2.0",
    "jsonschema",
    "numpy",
    "sympy >=1.10",
    'typing-extensions; python_version <"3.12.0"',
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest",
    ],
}


def long_description():
    """Parse long description from readme."""
    with open("README.md") as readme_file:
        return readme_file.read()


setuptools.setup(
    name="resxsec",
    version="0.1.0",
    author="The resxsec developers",
    description="Rein-Sehgal cross sections for neutrino resonance production",
    long_description=long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    license="GPLv3 or later",
    python_requires=">=3.9",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    tests_require=EXTRAS_REQUIRE["test"],
    package_data=PACKAGE_DATA,
    include_package_data=True,
)
