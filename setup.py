# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import setuptools

setuptools.setup(
    name='nx-timed-otp',
    version='0.1.0',
    python_requires='>=3.10',
    install_requires=['cryptography>=3.1'],
    packages=['timed_otp'],
    )
