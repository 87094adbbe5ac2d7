# Model clients sharing the async send(GenerationRequest) contract.
