class SimulationModel:
    """Narrow seam around the generative model: prompt in, raw text out."""

    def complete(self, system: str, prompt: str) -> str:
        raise NotImplementedError
