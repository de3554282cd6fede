from setuptools import setup, find_namespace_packages

setup(
    name="karaoke-sync",
    version="0.1.0",
    description="Scroll and highlight timed (LRC) lyrics in your terminal, synchronized to a local clock or a running MPRIS music player",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    license="MIT",
    packages=find_namespace_packages(include=["karaoke_sync", "karaoke_sync.*"]),
    package_data={"karaoke_sync.i18n": ["*.json"]},
    install_requires=[
        "colorama",
        "dbus-python",
        "typer",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "ruff",
            "mypy",
        ]
    },
    entry_points={
        "console_scripts": [
            "karaoke-sync=karaoke_sync.cli:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Utilities",
    ],
    keywords="lyrics karaoke terminal mpris lrc synchronized",
)
