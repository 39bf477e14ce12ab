"""
xsdgen: generate Go structs for encoding/xml from XML Schema documents.

The pipeline is load (:mod:`xsdgen.loader`), resolve (:mod:`xsdgen.resolver`)
and emit (:mod:`xsdgen.codegen`).
"""

__version__ = "0.1.0"
