from nestcss.store.stylesheet import RuleHandle, Stylesheet

__all__ = ["RuleHandle", "Stylesheet"]
