from setuptools import setup

setup(
    name='id-tokenizer',
    version='1.0',
    description='Tamper-evident, URL-safe tokens for integer IDs, with a small FastAPI service.',
    python_requires='>=3.10',
    py_modules=[
        'app',
        'baseconv',
        'config',
        'core_logic',
        'encoding',
        'errors',
        'kdf',
        'limiter',
        'models',
        'obfuscation',
        'router',
        'tagging',
    ],
    install_requires=[
        'fastapi',
        'pydantic>=2.5',
        'slowapi',
        'uvicorn',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
)
