from insertbench.bench.runner import main

raise SystemExit(main())
