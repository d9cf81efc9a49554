EXTEND_TO_WHITESPACE_LIMIT = 10

class AlignmentUtil:
    @staticmethod
    def extract_from_original(source: str, start: int, approximate_end: int) -> str:
        """Cut the covered substring out of the original text.

        A span whose end falls inside a word is pushed to the next space or newline when
        that is fewer than 10 characters away, since lossy steps may have shortened the word.
        """
        if approximate_end >= len(source):
            return source[start:]

        if not source[approximate_end].isspace():
            candidates: list[int] = [index for index in (source.find(" ", approximate_end), source.find("\n", approximate_end)) if index > 0]
            if candidates and min(candidates) - approximate_end < EXTEND_TO_WHITESPACE_LIMIT:
                approximate_end = min(candidates)
        return source[start:approximate_end]
