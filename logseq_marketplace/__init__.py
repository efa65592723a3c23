"""
Fetch the Logseq plugin marketplace from GitHub into a local JSON document.
"""
