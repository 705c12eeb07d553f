from setuptools import find_packages, setup


def get_version_and_docstring():
    ns = {"__doc__": "", "__version__": ""}
    docStatus = 0  # Not started, in progress, done
    for line in open("shaderdesc/__init__.py").readlines():
        if line.startswith("__version__"):
            exec(line.strip(), ns, ns)
        elif line.startswith('"""'):
            if docStatus == 0:
                docStatus = 1
                line = line.lstrip('"')
            elif docStatus == 1:
                docStatus = 2
        if docStatus == 1:
            ns["__doc__"] += line.rstrip() + "\n"
    return ns["__version__"], ns["__doc__"]


version, doc = get_version_and_docstring()

runtime_deps = ["Jinja2"]

extras_require = {
    "dev": ["black", "flake8", "flake8-black", "pep8-naming", "pytest"],
    "tests": ["pytest"],
}

setup(
    name="shaderdesc",
    version=version,
    description="Compile compact shader descriptions to HLSL and input layouts",
    long_description=doc,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    package_data={"shaderdesc": ["hlsl/*.hlsl"]},
    python_requires=">=3.7.0",
    install_requires=runtime_deps,
    extras_require=extras_require,
    zip_safe=False,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Software Development :: Compilers",
    ],
)
