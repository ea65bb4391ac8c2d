import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="chunkstruct",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Chunk based file formats for humans",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/chunkstruct",
    packages=setuptools.find_packages(exclude=['tests']),
    scripts=['scripts/pngchunk.py'],
    install_requires=[
        'bitstring',
    ],
    extras_require={
        'test': [
            'pytest',
            'pillow',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
