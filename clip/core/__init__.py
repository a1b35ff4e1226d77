"""The language pipeline: lexer, parser and evaluator."""
