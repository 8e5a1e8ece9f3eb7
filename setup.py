import os.path
import setuptools # type: ignore

root_path = os.path.dirname(__file__)

with open(os.path.join(root_path, "README.md"), "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="nameplate",
    version="0.1.0",
    author="Nick Gerner",
    author_email="nick.gerner@gmail.com",
    description="Nameplate: thread-safe evaluation of conditional display expressions for player labels.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(where="src"),
    package_dir={'': 'src'},

    package_data={
        'nameplate': ['py.typed'],
        'nameplate.data': ['*.toml'],
    },
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "simpleeval",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'nameplate_check = nameplate.check_conditions:main',
        ],
    },
)
