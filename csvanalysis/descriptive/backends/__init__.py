from csvanalysis.descriptive.backends.cpu import CPUDescriptiveBackend

__all__ = ["CPUDescriptiveBackend"]
