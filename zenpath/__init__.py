# zenpath: AI narrative content pipeline for an anxiety awareness game.
