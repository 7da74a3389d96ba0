"""
Business services. Each returns ServiceResult objects and never lets a
store failure escape.
"""
