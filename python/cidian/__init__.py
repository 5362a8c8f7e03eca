"""cidian - CC-CEDICT toolkit.

Parses the CC-CEDICT dictionary, normalizes its Pinyin, and resolves the
"variant of" references in glosses into a cross-reference map.

Core concepts:
    - Each non-comment line parses into one immutable Entry
    - Glosses may reference another headword ("variant of 憂鬱[you1 yu4]")
    - References resolve to line numbers; ambiguous or missing ones are
      reported rather than raised

Usage:
    from cidian.ingest import cedict
    from cidian.builder import ReferenceResolver
    from cidian.normalizer import normalize_pinyin

    with cedict.load("cedict_ts.u8") as parser:
        result = ReferenceResolver(parser).run()

    for line in result.format_map():
        print(line)

    normalize_pinyin(["zhong1", "guo2"]).text   # "zhōngguó"
"""

__version__ = "0.1.0"
