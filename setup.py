import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="face_template_migration",
    version="1.0.0",
    author="Face Template Migration Team",
    author_email="",
    description="Converts legacy FPVC face templates into normalized float vectors",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Image Recognition",
    ],
    python_requires=">=3.8",
    license="MIT",
    install_requires=[
        "numpy>=1.21.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "api": [
            "fastapi>=0.95.0",
            "pydantic>=1.10.0",
            "uvicorn>=0.20.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "fastapi>=0.95.0",
            "pydantic>=1.10.0",
            "httpx>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "face-migrate=face_template_migration.cli:main",
        ],
    },
)
