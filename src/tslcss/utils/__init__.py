# Authors: Isak Samsten
# License: BSD 3 clause
