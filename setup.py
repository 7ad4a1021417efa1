"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='scrawl-lang',
	version='0.1.0',
	packages=['scrawl', "scrawl.adapters", ],
	entry_points={
		'console_scripts': ["scrawl = scrawl.cmdline:main"],
	},
	license='MIT',
	description='A tiny postfix language whose programs draw with a turtle',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.10",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Multimedia :: Graphics",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.10',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"pygame>=2.4.0",
	],
	extras_require={
		'test': ["pytest"],
	},
)
