"""
Product catalog admin: REST backend and list-view client
"""
