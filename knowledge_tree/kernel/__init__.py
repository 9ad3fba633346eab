"""
Kernel layer: persistence models and the stores the roadmap core reads from
and writes to.
"""
