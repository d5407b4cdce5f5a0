"""
Its presence at the top of the checkout puts the checkout on the import path,
so the test-runner finds the marmoset package without an install.
"""
