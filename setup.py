from setuptools import setup

with open("requirements.txt") as f:
    required = f.read().splitlines()

exec(open("pystatdist/version.py").read())
setup(
    name="pystatdist",
    version=__version__,  # noqa: F821
    description="Probability distributions with tail-accurate evaluation and inversion",
    install_requires=required,
    extras_require={"test": ["pytest", "mpmath"]},
    packages=["pystatdist"],
)
