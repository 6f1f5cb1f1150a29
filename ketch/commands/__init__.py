from ketch.commands.build import build
from ketch.commands.clean import clean
from ketch.commands.new import new
from ketch.commands.show import show

__all__ = ["build", "clean", "new", "show"]
