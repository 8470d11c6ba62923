# Authors: Isak Samsten
# License: BSD 3 clause

version = "1.0.0"
