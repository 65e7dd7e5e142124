"""Install the gatekeeper account-request pipeline."""

from setuptools import setup, find_packages

setup(
    name='gatekeeper',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    package_data={'gatekeeper.schema': ['definitions/*.json']},
    install_requires=[
        "flask",
        "flask-sqlalchemy",
        "sqlalchemy",
        "werkzeug",
        "wtforms",
        "email-validator",
        "markupsafe",
        "python-json-logger>=3.1",
        "click",
        "captcha",
    ],
    extras_require={
        'test': [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        'console_scripts': [
            'gatekeeper-create-master=gatekeeper.create_master:create_master',
        ],
    },
    zip_safe=False
)
