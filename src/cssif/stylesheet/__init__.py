from cssif.stylesheet.parser import parse_declarations, parse_rule, parse_stylesheet, split_rules

__all__ = ["parse_declarations", "parse_rule", "parse_stylesheet", "split_rules"]
