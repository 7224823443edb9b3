"""campuscalm services.

- classifier_service: sentiment + urgency heuristics, run before the model
- llm_service: generative provider adapters, prompt building, reply parsing
- chat_service: request pipeline, safety floor and the HTTP endpoint
"""
