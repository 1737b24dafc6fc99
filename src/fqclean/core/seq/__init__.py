from .clean import *
