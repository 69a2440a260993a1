class InvalidVariantError(Exception):
    """
    raised when a structural variant cannot be created from the given breakpoints

    for example a negative position or a missing primary type
    """

    pass


class InvalidRecordError(ValueError):
    """
    raised when a row of a caller output file cannot be converted to a structural variant
    """

    def __init__(self, message, filename=None, row=None):
        ValueError.__init__(self, message, filename, row)
        self.filename = filename
        self.row = row

    def __str__(self):
        msg = self.args[0]
        if self.filename:
            msg = '{} (file: {})'.format(msg, self.filename)
        if self.row is not None:
            msg = '{} row: {}'.format(msg, self.row)
        return msg
