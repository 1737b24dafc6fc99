from .clean import CleanStats, ReadCleaner, clean_fastq
from .main import run
