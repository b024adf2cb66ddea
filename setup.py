from setuptools import setup

setup(
    name="squeezinja",
    version="0.1.0",
    author="Stanislav Feldman",
    description=("Jinja2 extension that minifies the static HTML of templates "
                 "at compilation time."),
    keywords="jinja2 html minify compress",
    packages=['squeezinja'],
    install_requires=["jinja2", "rjsmin", "rcssmin"],
    extras_require={"test": ["pytest"]},
)
