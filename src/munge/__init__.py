"""munge: a tiny DSL for declaring named extractions over an HTML document."""

from munge.document import parse_document
from munge.executor import Executor, run
from munge.munger import Munger, munge
from munge.parser import parse

__version__ = "0.1.0"

__all__ = ["Executor", "Munger", "munge", "parse", "parse_document", "run", "__version__"]
