"""Core modules for the ArUco marker console."""

from .dictionaries import *
from .generator import *
