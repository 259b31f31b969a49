import setuptools

setuptools.setup(
    name="incparsec",
    version="0.1.0",
    license="MIT License",
    description=(
        "Parser combinators library with explicit backtracking and "
        "incremental parsing"
    ),
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    python_requires=">=3.7",
    install_requires=["typing_extensions"],
    extras_require={"test": ["pytest"], "bench": ["pyperf"]},
    zip_safe=False,
)
