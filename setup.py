import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="titan",
    version="0.1.0",
    description="Interactive Gemini client for the terminal",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    install_requires=["idna>=3.0"],
    extras_require={"test": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["titan=titan.__main__:main"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Environment :: Console :: Curses",
        "Operating System :: POSIX",
        "Topic :: Internet",
    ],
    python_requires="~=3.8",  # Python >= 3.8 but < 4
    keywords=["gemini", "titan"],
)
