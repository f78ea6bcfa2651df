"""
Resumark - a PDF annotation editor for resumes and job descriptions.
"""
__version__ = "0.1.0"
