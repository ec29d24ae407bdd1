import importlib, os
from .simulation_model import SimulationModel

def load_model() -> SimulationModel:
    modpath = os.getenv("MODEL_MODULE")
    if not modpath:
        from careersim.model_impl.bedrock_model import BedrockModel
        return BedrockModel()
    mod, factory = modpath.split(":")
    return getattr(importlib.import_module(mod), factory)()
