"""
Assistant Services

Flow for one chat turn:

1. context_builder.py - normalise client context into a bounded AssistantContext
2. strategy_selector.py - language model when configured, deterministic otherwise
   - llm_strategy.py + prompt_builder.py: single chat-completion call
   - intent_router.py + intent_handlers.py: keyword intents, first match wins
3. action_suggester.py - follow-up actions derived from free-text model output

suggestions.py is the separate one-shot remediation summary endpoint.
"""
