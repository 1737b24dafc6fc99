from .fastq import FastqRecord, iter_fastq
from .fqio import FastqReader, open_fastq, read_fastq
from .mate import (MateInfo,
                   MateTag,
                   extract_mate_info,
                   iter_interleaved_fastq,
                   iter_paired_fastq,
                   validate_paired_reads)
from .phred import (QualityEncoding,
                    QualityScale,
                    get_encoding,
                    phred33,
                    phred33_sam,
                    phred64,
                    solexa)
