from mcgen.compiler.cli import main

raise SystemExit(main())
