from setuptools import setup, find_packages

setup(
    name="dictlookup",
    version="0.3.0",
    packages=find_packages(exclude=["dictlookup.tests"]),
    install_requires=[
        "aiohttp>=3.8.0",
        "python-dotenv>=0.19.0",
        "langdetect>=1.0.9",
        "tenacity>=8.0.0",
        "tencentcloud-sdk-python>=3.0.0,<3.1.50",
        "beautifulsoup4>=4.11.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    author="Your Name",
    author_email="your.email@example.com",
    description="多服务翻译与词典查询库",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/dictlookup",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
)
