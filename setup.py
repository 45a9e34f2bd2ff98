from setuptools import setup, find_packages

setup(name='syncgen',
      version='0.1.0',
      description='Turn an async function into a fully synchronous iterator, one emitted item at a time',
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: MIT License",
          "Operating System :: OS Independent",
      ],
      keywords='coroutine generator iterator async trio',
      license='MIT',
      python_requires='>=3.9',
      packages=find_packages(),
      install_requires=[
          'outcome',
          'trio',
      ],
)
