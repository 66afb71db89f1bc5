'''
Tools to make the Maven dependencies of a project available to Eclipse PDE
'''
