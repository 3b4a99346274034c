"""Application services for the brewer CLI.

Services implement the release logic, coordinating between core/ and the
infrastructure layers (git/, github/, platform/).
"""
