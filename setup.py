from setuptools import setup, find_packages

setup(
    name="densematrix",
    version="0.1",
    description="Dense matrix arithmetic over any numeric scalar type",
    long_description=("Dense matrices with row-major storage, generic over Python, numpy fixed-width and "
                      "user-registered scalar types: construction, element access, addition, multiplication, "
                      "identity, transpose and Gauss-Jordan inversion"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.8",
    packages=find_packages(include=["densematrix", "densematrix.*"]),
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["matrix", "linear algebra", "dense", "generic"],
    zip_safe=False,
)
