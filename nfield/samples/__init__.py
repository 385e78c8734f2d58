"""
Samples
=======

Sample application demonstrating Nfield SDK usage.
"""
