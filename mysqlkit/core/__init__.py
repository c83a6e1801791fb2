"""
Settings, errors and the PyMySQL driver collaborator.
"""
