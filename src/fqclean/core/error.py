""" Generic Exceptions """


class FormatError(ValueError):
    """ A FASTQ record or one of its fields is malformed. """


class PairError(ValueError):
    """ Two reads cannot be the mates of one paired-end read. """


class IncompatibleOptionsError(ValueError):
    """ Two or more options are incompatible. """
