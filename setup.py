# setup.py
from setuptools import setup, find_packages

setup(
    name="zeal",
    version="0.1.0",
    description="An indentation-sensitive scripting language: scanner, parser and tree-walking evaluator",
    packages=find_packages(include=["zeal", "zeal.*", "zeal_lsp", "zeal_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.3,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "zeal=zeal.__main__:main",
            "zeal-ls=zeal_lsp.server:main",
        ],
    },
    zip_safe=False,
)
