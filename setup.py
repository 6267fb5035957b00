import re, setuptools, os.path

description = "Lightning network payment channel network simulator with " \
              "capacity constrained routing."
if os.path.exists("README.md"):
    with open("README.md", "r") as fh:
        long_description = fh.read()
else:
    long_description = description

with open("./lnsimulator/__init__.py", "r") as f:
    MATCH_EXPR = "__version__[^'\"]+(['\"])([^'\"]+)"
    VERSION = re.search(MATCH_EXPR, f.read()).group(2)

setuptools.setup(
    name="lnsimulator",
    version=VERSION,
    description=description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["test", "test.*"]),
    python_requires='>=3.9.0',
    install_requires=[
        "networkx>=3.0",
        "numpy>=1.24.2",
        "Pygments>=2.17.2",
    ],
    extras_require={
        "test": [
            "pytest",
        ]
    },
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            "lnsimulator = lnsimulator.lnsimulator:main",
        ]
    },
)
