import os

from setuptools import setup

readme_path = os.path.join(os.path.dirname(
    os.path.abspath(__file__)),
    'README.md',
)
long_description = open(readme_path).read()

setup(
    name='firesmart',
    version='0.1.0',
    packages=['firesmart', 'firesmart.cli'],
    description="Annotate facility floor plans with storage zones and run "
                "AI fire-safety analyses against them",
    long_description=long_description,
    long_description_content_type='text/markdown',
    zip_safe=False,
    python_requires='>=3.10',
    classifiers=[
        'Intended Audience :: Developers',
        'Programming Language :: Python',
        'License :: OSI Approved :: MIT License',
    ],
    install_requires=[
        'google-genai',
    ],
    extras_require={
        'cli': ['click'],
        'test': ['click', 'pytest', 'pytest-asyncio'],
    },
    entry_points={
        'console_scripts': ['firesmart-cli=firesmart.cli.__main__:cli'],
    },
    setup_requires=[],
)
