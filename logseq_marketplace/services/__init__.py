"""
Pipeline steps and the aggregator that drives them.

This package is responsible for:
* Talking to the GitHub contents, commits and raw endpoints.
* Storing normalized icon files.
* Turning listings into output records, one package at a time.
"""
