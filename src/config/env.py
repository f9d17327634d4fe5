from pathlib import Path

from environs import Env

BASE_DIR = Path(__file__).parent.parent.parent

env = Env(expand_vars=True)
env.read_env()
