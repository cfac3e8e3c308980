"""
Batch job model for the command line front end
"""

from dataclasses import dataclass, field
from typing import Any, List

from .directives import DirectiveList


@dataclass
class ParsedJob:
    """
    One entry of a YAML job file, with its control string parsed

    Attributes:
        name: Job name; also the stem of the output file
        control: Control string as written in the job file
        args: Positional arguments for the control string
        directives: Parsed directive tree for control

    Example:
        For the job file entry
            - name: totals
              control: "~10,'_:D"
              args: [-4200]
        ParsedJob(name="totals", control="~10,'_:D", args=[-4200],
                  directives=(Decimal(min_columns=10, pad_char='_', ...),))
    """
    name: str
    control: str
    args: List[Any] = field(default_factory=list)
    directives: DirectiveList = ()
