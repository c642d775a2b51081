"""Install the game login server."""

from setuptools import setup, find_packages

setup(
    name='game-login-server',
    version='0.3.0',
    packages=find_packages(exclude=['*test*']),
    package_data={'loginserver': ['data/*.json']},
    py_modules=['wsgi', 'app', 'create_account', 'generate_token'],
    install_requires=[
        "flask>=2.2",
        "flask-sqlalchemy>=3.0",
        "sqlalchemy>=2.0",
        "bcrypt",
        "pytz",
        "python-json-logger>=3.1",
        "click",
        "retry",
        "psycopg2-binary"
    ],
    extras_require={
        'test': [
            "pytest",
            "jsonschema"
        ]
    },
    zip_safe=False
)
