from .driver import JaiCompilerDriver, is_jai_source, JAI_EXTENSION
