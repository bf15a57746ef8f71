#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
sessionharness包的安装脚本
"""

from setuptools import setup, find_packages
import os

# 获取包的版本号
try:
    with open(os.path.join('sessionharness', '__init__.py'), 'r', encoding='utf-8') as f:
        for line in f:
            if line.startswith('__version__'):
                version = line.strip().split('=')[1].strip().strip('"').strip("'")
                break
        else:
            version = '0.1.0'
except Exception:
    version = '0.1.0'

# 读取README文件内容
try:
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()
except Exception:
    long_description = "带Cookie罐的进程内HTTP测试会话"

# 定义依赖项
install_requires = [
    'aiohttp>=3.8.0',
    'multidict>=6.0',
    'yarl>=1.8',
    'beautifulsoup4>=4.10',
    'PyYAML>=6.0',
]

# 测试依赖
extras_require = {
    'test': [
        'pytest>=7.0',
        'pytest-asyncio>=0.21',
    ],
}

# 设置包的配置
setup(
    name='sessionharness',
    version=version,
    description='带Cookie罐的进程内HTTP测试会话',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='PyHack-Lab',
    author_email='',
    url='',
    packages=find_packages(include=['sessionharness', 'sessionharness.*']),
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires='>=3.8',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Topic :: Software Development :: Testing',
        'Topic :: Internet :: WWW/HTTP',
    ],
    keywords='testing, http, cookies, session, aiohttp',
)
